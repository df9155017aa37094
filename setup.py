from setuptools import setup, find_packages

setup(
    name="xrplbot",
    version="0.1.0",
    description="GitHub bot that explains XRP Ledger transactions in issue comments",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"xrplbot": ["data/*.json"]},
    install_requires=[
        'xrpl-py',
        'requests',
        'toml',
        'loguru'
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    python_requires=">=3.11",  # Adjust version as needed
)
