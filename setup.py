from setuptools import setup, find_packages

setup(
    name="bond_yield_engine",
    version="0.1.0",
    description="Bond yield, price, accrued interest and rate conversion engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"bond_yield_engine": ["data/*.json"]},
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
        ],
    },
    python_requires=">=3.8",
)
