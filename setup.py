from setuptools import setup, find_packages

setup(
    name="livescribe",
    version="0.1.0",
    description="Live stream transcription, translation and political-content tagging server",
    author="",
    python_requires=">=3.10",
    packages=find_packages(include=["livescribe", "livescribe.*"]),
    install_requires=[
        "aiohttp>=3.9.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "rich>=12.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "livescribe=livescribe.main:main",
        ],
    },
)
