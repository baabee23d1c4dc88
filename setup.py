"""
Setup script for moodle-xml.

moodle-xml builds quiz questions in Python and exports them as a
Moodle XML document ready for the question bank importer:

1. Short answer, true/false and multiple choice questions
2. Category markers that create the course category on import
3. Validation before any byte is written

Configuration is read from MOODLE_XML_* environment variables.
"""

from setuptools import find_packages, setup

setup(
    name="moodle-xml",
    version="0.1.0",
    description="Build Moodle quiz questions and export them as Moodle XML",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="moodle quiz xml education export",
)
