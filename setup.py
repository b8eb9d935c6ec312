from setuptools import setup, find_namespace_packages
from os import path

requires = [
    "click>=8.0,<9",
    "colorlog~=6.4",
    "ply~=3.0",
    "pydantic~=2.0",
    # \X grapheme cluster matching
    "regex>=2023.0",
    "texttable~=1.0",
]


# read the contents of your README file
this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

version = "2018.2.0"

setup(
    version=version,
    python_requires=">=3.9",  # also update classifiers
    # Meta data
    name="bracket2",
    description="Parser for the bracket language",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Inmanta",
    author_email="code@inmanta.com",
    license="Apache Software License 2",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Compilers",
        "Programming Language :: Python :: 3.9",
    ],
    keywords="parser language brackets",
    # Packaging
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    zip_safe=False,
    include_package_data=True,
    install_requires=requires,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "bracket = bracket.main:main",
        ],
    },
)
