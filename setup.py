# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.0.1",
    description="A minimal Lisp interpreter with Q-expressions and curried closures",
    packages=find_packages(include=["lispy", "lispy.*"]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "prompt_toolkit>=3.0",
        "typer>=0.12",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "hypothesis>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "lispy=lispy.cli:app",
        ],
    },
    zip_safe=False,
)
