"""
refract - Package Configuration
"""

from setuptools import setup, find_packages

setup(
    name="refract",
    version="0.1.0",
    description="Composable optics for reading and immutably updating nested data",
    packages=find_packages(include=["refract", "refract.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "mypy>=1.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Libraries",
    ],
)
