from setuptools import setup, find_packages

setup(
    name="node-map",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0",
        "typing-extensions>=4.7",
        "asgi-correlation-id>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.9,<4.0",
)
