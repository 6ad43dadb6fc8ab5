from setuptools import setup, find_packages

setup(
    name="atomgen",
    version="1.0.0",
    description="Build, verify and serialize Atom 1.0 (RFC 4287) syndication feeds",
    author="atomgen contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "feedparser>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "atomgen=atomgen.cli:main",
        ],
    },
    python_requires=">=3.9",
)
