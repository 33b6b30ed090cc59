from setuptools import setup, find_packages


setup(
    name="pgparmor",
    version="0.1",
    packages=find_packages(include=["pgparmor", "pgparmor.*"]),
    description="Streaming OpenPGP ASCII armor and clear-signed text encoder.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pgparmor=pgparmor.cli:main",
        ]
    },
)
