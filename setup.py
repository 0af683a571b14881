# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="modsize",
    version="0.1.0",
    description="Disk footprint report for node_modules, as a percentage-weighted tree",
    packages=find_namespace_packages(where="src", include=["modsize", "modsize.*"]),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'modsize=modsize.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
