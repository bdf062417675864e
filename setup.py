from setuptools import setup, find_packages

setup(
    name="jsonfeeder",
    version="1.0.0",
    description="Build JSON Feed documents from post files or existing RSS/Atom feeds",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "feedparser>=6.0.0",
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "jsonfeeder=jsonfeeder.cli:main",
        ],
    },
    python_requires=">=3.9",
)
