from setuptools import find_packages, setup

setup(
    name="swap_tokens",
    version="0.1.0",
    description="Shared transaction data model for cross-chain swap bridges",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "structlog>=23.0.0",
        "python-bitcoinlib>=0.12.0",
        "click>=8.1.0",
        "pydantic>=2.7.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "swap-tokens=swap_tokens.cli:main",
        ],
    },
)
