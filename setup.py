import setuptools

setuptools.setup(
  name="pickrank",
  version="1.0.0",
  description="8-bit RGBA PNG codec that ranks color coded pick image objects and labels them on a top view.",
  python_requires=">=3.8",
  packages=[ "pickrank", "pickrank_cli" ],
  install_requires=[
    "numpy",
    "fastremap",
    "click",
  ],
  extras_require={
    "test": [
      "pytest",
    ],
  },
  entry_points={
    "console_scripts": [
      "pickrank=pickrank_cli:main"
    ],
  },
)
