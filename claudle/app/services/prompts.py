"""Prompt construction for the LLM-backed routes."""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from claudle.app.game.types import MAX_GUESSES, WORD_LENGTH, Personality, Theme

# (letter, 1-based position)
LetterPosition = Tuple[str, int]

_COMMENTARY_PERSONAS = {
    Personality.LASSO: (
        "You are Coach Ted Lasso - positive, encouraging, folksy, and optimistic. "
        "Use his speaking style and catchphrases."
    ),
    Personality.KENT: (
        "You are Roy Kent - gruff, direct, occasionally profane (but keep it mild), "
        "and brutally honest but caring underneath."
    ),
}

_COACHING_PERSONAS = {
    Personality.LASSO: (
        "You are Coach Ted Lasso - positive, encouraging, folksy, and optimistic. "
        "Be supportive but educational."
    ),
    Personality.KENT: (
        "You are Roy Kent - gruff, direct, occasionally profane (but keep it mild), "
        "and brutally honest but helpful."
    ),
}


@dataclass
class GuessAnalysis:
    """What the player has learned so far, as fed to the model."""
    ruled_out: List[str] = field(default_factory=list)
    confirmed: List[LetterPosition] = field(default_factory=list)
    misplaced: List[LetterPosition] = field(default_factory=list)

    def is_confirmed_at(self, letter: str, position: int) -> bool:
        return (letter, position) in self.confirmed

    def is_confirmed_elsewhere(self, letter: str, position: int) -> bool:
        return any(c == letter and p != position for c, p in self.confirmed)


def analyze_guesses(target_word: str, guesses: Sequence[str]) -> GuessAnalysis:
    """Sort every guessed letter into confirmed, misplaced or ruled out.

    This is a per-position summary for prompt context, not tile scoring:
    repeated letters are not disambiguated here.
    """
    analysis = GuessAnalysis()
    target = target_word.upper()

    for guess in guesses:
        guess = guess.upper()
        for i, letter in enumerate(guess[:WORD_LENGTH]):
            if i < len(target) and target[i] == letter:
                analysis.confirmed.append((letter, i + 1))
            elif letter in target:
                analysis.misplaced.append((letter, i + 1))
            elif letter not in analysis.ruled_out:
                analysis.ruled_out.append(letter)

    return analysis


def _joined(items: Sequence[str], empty: str) -> str:
    return ", ".join(items) or empty


def _positions(items: Sequence[LetterPosition], template: str, empty: str) -> str:
    return _joined([template.format(letter=letter, position=position) for letter, position in items], empty)


def word_prompt(theme: Theme, used_words: Sequence[str]) -> str:
    exclude = (
        f"Do NOT use any of these words that have already been used: {', '.join(used_words)}."
        if used_words
        else ""
    )
    return f"""Generate exactly one 5-letter word for a Wordle game with the theme: "{theme.description}".

Requirements:
- Exactly 5 letters
- Uses only standard English alphabet (A-Z)
- Must be a real, common word that players would know
- Appropriate for the theme: {theme.description}
{exclude}

Respond with ONLY the word in uppercase letters, nothing else."""


def hint_prompt(
    theme: Theme,
    personality: Personality,
    target_word: str,
    guesses: Sequence[str],
) -> str:
    analysis = analyze_guesses(target_word, guesses)
    persona = _COMMENTARY_PERSONAS[personality]
    return f"""{persona}

The player is playing ClaudLE with the theme "{theme.description}". They're on guess {len(guesses)} of {MAX_GUESSES}.

Target word: {target_word}
Their guesses so far: {_joined(guesses, "None yet")}
Letters not in the word: {_joined(analysis.ruled_out, "None identified yet")}
Correct letters in correct positions: {_positions(analysis.confirmed, "{letter} in position {position}", "None yet")}
Correct letters in wrong positions: {_positions(analysis.misplaced, "{letter} (tried in position {position})", "None yet")}

Give them a helpful hint without revealing the answer. Make the hint more specific as they get closer to guess {MAX_GUESSES}. Stay in character!"""


def review_current_guess(analysis: GuessAnalysis, current_guess: str) -> List[str]:
    """Flag letters in a not-yet-submitted guess that contradict known facts."""
    notes = []
    for i, letter in enumerate(current_guess.upper()[:WORD_LENGTH]):
        position = i + 1
        if letter in analysis.ruled_out:
            notes.append(f"{letter} (position {position}): Already ruled out")
        elif analysis.is_confirmed_at(letter, position):
            notes.append(f"{letter} (position {position}): Good - confirmed correct here")
        elif analysis.is_confirmed_elsewhere(letter, position):
            notes.append(
                f"{letter} (position {position}): Wrong position - you know this letter belongs elsewhere"
            )
    return notes


def coaching_prompt(
    theme: Theme,
    personality: Personality,
    target_word: str,
    guesses: Sequence[str],
    current_guess: str,
) -> str:
    analysis = analyze_guesses(target_word, guesses)
    notes = review_current_guess(analysis, current_guess)
    persona = _COACHING_PERSONAS[personality]
    return f"""{persona}

The player is playing ClaudLE (theme: "{theme.description}") and is considering the guess "{current_guess}" for attempt number {len(guesses) + 1}.

Game state:
- Previous guesses: {_joined(guesses, "None yet")}
- Letters definitely not in word: {_joined(analysis.ruled_out, "None identified")}
- Confirmed correct positions: {_positions(analysis.confirmed, "{letter} in position {position}", "None yet")}
- Letters in word but wrong position: {_positions(analysis.misplaced, "{letter} (was tried in position {position})", "None yet")}

Analysis of their potential guess "{current_guess}":
{chr(10).join(notes) or "No obvious issues detected"}

WITHOUT revealing the target word, provide strategic coaching about this guess:
1. Is this a smart strategic choice given what they know?
2. Are they reusing ruled-out letters unnecessarily?
3. Are they placing confirmed letters in wrong positions?
4. Could they make a more strategic guess to gather more information?
5. Encourage good strategy and gently redirect poor choices.

Keep it under 100 words and stay in character. Be encouraging but educational."""


def game_over_prompt(
    theme: Theme,
    personality: Personality,
    target_word: str,
    guess_count: int,
    won: bool,
) -> str:
    persona = _COMMENTARY_PERSONAS[personality]
    if won:
        ask = "Give them a congratulatory message in character."
    else:
        ask = (
            'Give them an encouraging "better luck next time" message. '
            'If you\'re Ted Lasso, you might say "Remember...be a goldfish..." '
            'If you\'re Roy Kent, you might say "Oy, that\'s gotta sting..."'
        )
    return f"""{persona}

The player just {"won" if won else "lost"} a ClaudLE game. The word was "{target_word}" and they took {guess_count} guesses.
Theme: {theme.description}

{ask}

Keep it short and stay in character!"""
