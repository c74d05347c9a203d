from setuptools import setup, find_packages

setup(
    name="uiauto-appstore",
    version="1.0.0",
    packages=find_packages(include=["uiauto_appstore", "uiauto_appstore.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
        "psutil>=5.8",
        "atomacos>=3.2.0; sys_platform == 'darwin'",
        "pyobjc-framework-Cocoa>=7.0; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "uiauto_appstore": ["schemas/*.json"],
    },
    entry_points={
        "console_scripts": [
            "uiauto-appstore=uiauto_appstore.cli:main",
        ],
    },
)
