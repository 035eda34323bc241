# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="sbomtree",
    version="0.1.0",
    description="Dependency forest construction and hierarchy-preserving filtering for SBOM catalogues",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["sbomtree*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
