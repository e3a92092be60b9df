from setuptools import find_packages, setup


def read_requirements(file):
    with open(file) as f:
        return [line for line in f.read().splitlines() if line and not line.startswith("#")]


setup(
    name="ordbok",
    use_scm_version={"fallback_version": "0.1.0"},
    setup_requires=["setuptools_scm"],
    packages=find_packages(include=["ordbok", "ordbok.*"]),
    python_requires=">=3.10",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": read_requirements("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "ordbok = ordbok.main:main",
        ],
    },
)
