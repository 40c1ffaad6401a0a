"""Prostate-Cancer k-NN — minimal setup.py for editable installs."""

from setuptools import setup, find_packages

setup(
    name="prostate-cancer-knn",
    version="1.0.0",
    description="k-nearest-neighbour classification pipeline for the prostate cancer dataset",
    author="LucaGandolfi77",
    python_requires=">=3.10",
    packages=find_packages(include=["data", "models", "pipeline", "eda", "utils"]),
    install_requires=[
        "scikit-learn>=1.3.0",
        "xgboost>=2.0.0",
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "matplotlib>=3.7.0",
        "seaborn>=0.12.0",
        "pyyaml>=6.0",
        "joblib>=1.3.0",
    ],
    extras_require={
        "dev": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "prostate-knn=pipeline.evaluate:main",
            "prostate-train=pipeline.train:main",
        ],
    },
)
