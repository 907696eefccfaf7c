from setuptools import setup, find_packages

setup(
    name="finmath_engine",
    version="0.1.0",
    description="Financial mathematics calculation engine (interest theory, annuities, loans, bonds, duration, term structure, swaps)",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "pydantic>=2",
        "pydantic-settings>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
)
