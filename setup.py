"""
Sloth VDF Setup
"""

from pathlib import Path

from setuptools import setup, find_packages

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text(encoding="utf-8") if readme.exists() else ""

setup(
    name="sloth-vdf",
    version="0.1.0",
    author="Sloth VDF Team",
    description="Sloth Verifiable Delay Function over prime fields",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "gmpy2>=2.1.5",
        "pycryptodome>=3.19.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-timeout>=2.2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sloth-vdf=sloth.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
    ],
    keywords="vdf sloth verifiable-delay-function randomness-beacon",
)
