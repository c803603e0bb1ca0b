from setuptools import setup, find_packages

setup(
    name="shrinkdeck",
    version="0.1.0",
    packages=find_packages(include=["shrinkdeck_core", "shrinkdeck_api", "shrinkdeck_api.*", "shrinkdeck_cli"]),
    install_requires=[
        "flask>=2.3",
        "flask-cors>=4.0",
        "redis>=4.5",
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "fakeredis>=2.20",
        ],
    },
    author="Shrinkdeck Team",
    description="Shrinking-deck trick-taking game engine, Redis-backed API and terminal client",
    python_requires=">=3.10",
)
