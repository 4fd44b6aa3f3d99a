from setuptools import setup, find_packages

setup(
    name="sicksicker",
    version="0.1.0",
    packages=find_packages(include=["sicksicker", "sicksicker.*"]),
    url="",
    license="",
    author="",
    author_email="",
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "pandas>=1.3",
        "pyDOE>=0.3.8,<0.4",
        "PyYAML>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=6",
        ],
    },
    description="Bayesian calibration engine for the Sick-Sicker cohort model",
)
