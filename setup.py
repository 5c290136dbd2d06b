from setuptools import setup, find_packages

setup(
    name="teestream",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "python-dotenv",
        "colorama",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
