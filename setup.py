"""Packaging for FocusBoard.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "FocusBoard",
        "CFBundleDisplayName": "FocusBoard",
        "CFBundleIdentifier": "com.focusboard.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="FocusBoard",
    version="0.1.0",
    packages=find_packages(include=["focusboard", "focusboard.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["focusboard = focusboard.__main__:main"],
    },
)
