from setuptools import setup, find_packages

setup(
    name="lambda-louvain",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "scipy",
        "scikit-learn",
        "pandas",
        "numba"
    ],
    extras_require={
        "test": ["pytest"],
    },
    author="Connor Frankston",
    description="Multilevel Louvain clustering for the resolution-parameterized correlation clustering objective",
    python_requires=">=3.8",
)
