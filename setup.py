from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = f.read().splitlines()

setup(
    name = 'obskit',
    version = '0.1.0',
    description = 'Metrics registry built from declarative JSON/YAML configuration files',
    packages = find_packages(exclude=['test', 'test.*']),
    python_requires = '>=3.10',
    install_requires = required,
    extras_require = {
        'test': ['pytest', 'pytest-cov']
    }
)
