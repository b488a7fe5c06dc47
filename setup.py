# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="featuredocs",
    version="0.1.0",
    description="Builds a navigable, tag-indexed documentation tree from Gherkin feature files",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["featuredocs*"]),
    python_requires=">=3.9",
    install_requires=[
        "gherkin-official",  # Gherkin grammar parser
        "markdown-it-py",  # Description markdown to HTML
        "parse",  # Step definition patterns
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'featuredocs=featuredocs.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
