# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treesmith",
    version="0.1.0",
    description="Turn a plain list of paths into a validated project tree, a zip archive or real folders",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treesmith", "treesmith.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'treesmith=treesmith.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
