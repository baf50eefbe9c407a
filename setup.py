from setuptools import setup, find_packages

setup(
    name="claudle",
    version="1.0.0",
    packages=find_packages(include=["claudle", "claudle.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "starlette",
        "pydantic>=2",
        "pydantic-settings>=2.7",
        "httpx",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
