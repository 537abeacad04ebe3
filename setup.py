from setuptools import find_packages, setup

setup(
    name="graph-mapper",
    version="0.1.0",
    description="Declarative, bidirectional graph-to-graph data mapping",
    packages=find_packages(include=["graph_mapper", "graph_mapper.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "loguru>=0.7.0",
        "beautifulsoup4>=4.12.0",
        "pandas>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.11",
)
