from setuptools import setup, find_packages

setup(
    name="disle",
    description="Alias expansion engine for dice rolling chat bots",
    python_requires='>3.10',
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    license="Proprietary",
    classifiers=[
        'License :: Other/Proprietary License',
    ],

    install_requires=[
        "click>=8.1.3",
        "tomlkit>=0.11.8",
        "serum==5.1.0",
        "rich>=13.0.0",
        ],
    extras_require={
        "test": ["pytest"],
    },

    entry_points="""
        [console_scripts]
        disle=disle.disle:main
    """,
)
