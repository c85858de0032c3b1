from setuptools import setup, find_packages

setup(
    name="stopclock",
    version="0.1.0",
    description="Dual-clock stopwatch & countdown timer w/ an isolated-process clock",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "typer",
        "rich",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "stopclock=stopclock.cli.app:app",
        ],
    },
    python_requires=">=3.11",
)
