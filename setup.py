"""setuptools setup for Countdown.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup, find_packages

setup(
    name="Countdown",
    version="0.1.0",
    description="Drift-correcting one-second countdown timer with token-based formatting",
    packages=find_packages(include=["countdown", "countdown.*"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=["PyQt6>=6.4"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={
        "console_scripts": ["countdown=countdown.__main__:main"],
    },
)
