from setuptools import setup, find_packages


def read_requirements(filename='requirements.txt'):
    with open(filename, 'r') as f:
        requirements = []
        for line in f:
            line = line.strip()
            # Skip comments and empty lines
            if line and not line.startswith('#'):
                requirements.append(line)
        return requirements

setup(
    name='fastlocale',
    version='0.1.0',
    description='Per-request locale resolution and view localization for FastAPI',
    author='pitpit',
    packages=find_packages(exclude=['*.tests', '*.tests.*']),
    install_requires=read_requirements(),
    extras_require={
        'test': read_requirements('requirements-test.txt'),
    },
    entry_points={
        'console_scripts': [
            'fastlocale=fastlocale.cli:main',
        ],
    },
    include_package_data=True,
    python_requires='>=3.8',
)
