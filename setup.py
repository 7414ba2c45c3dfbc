from setuptools import setup, find_packages

setup(
    name="connect4ai",
    version="0.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",
        "filelock",  # Locking for the stats file
    ],
    extras_require={
        "test": ["pytest"],
    },
)
