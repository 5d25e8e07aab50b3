"""setuptools setup for analogtimer.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup, find_packages

setup(
    name="analogtimer",
    version="0.1.0",
    description="Analog countdown timer component for PyQt6",
    packages=find_packages(include=["analogtimer", "analogtimer.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
)
