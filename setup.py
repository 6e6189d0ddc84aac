from setuptools import setup, find_packages

setup(
    name="typemorph",
    version="0.1.0",
    description="Typewriter animations over a live render tree",
    packages=find_packages(include=["typemorph", "typemorph.*"]),
    install_requires=[
        "rich",
        "markdown-it-py",
        "nh3",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    python_requires=">=3.11",
)
