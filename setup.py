from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="plantree",
    version="0.0.1",
    description="Condition and effect evaluator for symbolic planning formulas",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["plantree*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "dev": [
            "mypy",
            "pytest",
        ],
    },
    license="MIT",
)
