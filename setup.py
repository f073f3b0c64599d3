"""
Setup script for the career portal gateway.

Allows development installation with `pip install -e .[test]`
"""

from setuptools import setup, find_packages

setup(
    name="career-portal-gateway",
    version="1.0.0",
    packages=find_packages(include=["career_gateway", "career_gateway.*", "career_portal", "career_portal.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "httpx>=0.27",
        "requests>=2.31",
        "python-dotenv>=1.0",
        "python-multipart>=0.0.9",
        "boto3>=1.34",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "pytest-mock>=3.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "career-gateway=career_gateway.__main__:main",
        ],
    },
)
