from setuptools import setup, find_packages

setup(
    name="timecalc",
    version="0.1.0",
    description="Calculator for durations in hours, minutes and seconds",
    author="Valerio Galano",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "PyYAML>=6.0",
    ],
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "timecalc=timecalc.cli:main",
        ],
    },
)
