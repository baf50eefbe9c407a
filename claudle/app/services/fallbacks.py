"""Canned replies served when the LLM provider is unavailable."""

from claudle.app.game.types import Personality

COACHING_DISABLED_MESSAGE = (
    "Interactive coaching is currently disabled. Use the hint button for strategic advice!"
)

FALLBACK_HINTS = {
    Personality.LASSO: (
        "Well, I believe in you! Sometimes the best strategy is to trust your gut and "
        "remember that every guess teaches us something new. You're doing great out there!"
    ),
    Personality.KENT: (
        "Right, you're overthinking this. Focus on what you know and stop second-guessing "
        "yourself. You've got the letters, now use them properly."
    ),
}

FALLBACK_COACHING = {
    Personality.LASSO: (
        "Hmm, having trouble analyzing that one. But you know what? Trust your instincts! "
        "You've got this, and every guess is teaching us something new."
    ),
    Personality.KENT: (
        "Right, can't analyze that properly right now. But listen - stick to what you know "
        "and don't overthink it. You've got the tools, use them."
    ),
}

FALLBACK_GAME_OVER = {
    Personality.LASSO: {
        True: (
            "Well, would you look at that! You did it! That's what I call some top-notch "
            "word-guessing right there. Keep that positive energy flowing!"
        ),
        False: (
            "Hey now, don't you worry about it. Remember, be a goldfish - short memory for "
            "the tough times. You'll get 'em next time, I believe in you!"
        ),
    },
    Personality.KENT: {
        True: "Not bad. You actually did it. Proper job there. Don't let it go to your head though.",
        False: (
            "Oy, that's gotta sting a bit. But you know what? You gave it a proper go. "
            "Dust yourself off and try again."
        ),
    },
}
