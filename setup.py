"""
Setup script per fluke-is2-converter.
"""

from setuptools import setup, find_packages

# Legge il contenuto del README
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Legge i requisiti
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="fluke-is2-converter",
    version="0.2.0",
    author="Lorenzo Ghidini",
    author_email="lorigh46@gmail.com",
    description="Convert Fluke .is2 thermal files to infrared and visual images",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/LoriGH25/FlukeReader_Python",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Physics",
        "Topic :: Scientific/Engineering :: Image Processing",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "fluke-is2=fluke_is2_converter.cli:main",
        ],
    },
)
