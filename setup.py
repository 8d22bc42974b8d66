from setuptools import setup, find_packages

setup(
    name="annovep",
    version="0.1.0",
    description="Add tags to the CSQ field of VEP-annotated VCFs from a TSV lookup table",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "annovep=annovep.cli:main",
        ],
    },
    install_requires=[
        "pysam",
        "pyyaml",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
