from setuptools import setup, find_packages

setup(
    name="lww-graph",
    version="0.1.0",
    description="State-based Last-Writer-Wins element graph CRDT",
    author="adamfilli",
    packages=find_packages(include=["lwwgraph", "lwwgraph.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["lwwgraph-demo=lwwgraph.demo:main"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
