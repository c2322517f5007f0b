import os

from setuptools import setup, find_packages

# Read the version without importing the package, whose dependencies
# may not be installed yet at build time
about = {}
with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "printfmt", "version.py")) as f:
    exec(f.read(), about)

setup(
    name="printfmt",
    version=about["__version__"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "lark>=1.1.5",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "typer>=0.9.0",
        "pydantic>=2.0.0",
        "wcwidth>=0.2.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "printfmt=printfmt.main:app",
        ],
    },
    python_requires=">=3.9",
)
