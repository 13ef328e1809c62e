from setuptools import setup
from cukeslicer import __version__

setup(
    name="cukeslicer",
    long_description="Cucumber Slicer splits Cucumber JSON reports into one .feature file per scenario "
    "so that scenarios can be distributed across parallel test workers.",
    version=__version__,
    packages=[
        "cukeslicer",
        "cukeslicer.assembly",
        "cukeslicer.commands",
        "cukeslicer.readers",
        "cukeslicer.writers",
        "cukeslicer.data_classes",
        "cukeslicer.logging",
    ],
    include_package_data=True,
    install_requires=[
        "click>=8.0.3,<9.0.0",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde>=0.12.0,<1.0.0",
        "beartype>=0.17.0,<1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points="""
        [console_scripts]
        cukeslicer=cukeslicer.cli:cli
    """,
)
