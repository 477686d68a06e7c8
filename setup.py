from setuptools import find_packages, setup


packages = find_packages(where='src')

with open('requirements.txt', encoding='utf-8') as requirements_file:
    requirements = [line.strip() for line in requirements_file if line.strip() and not line.startswith('#')]


setup(
    name='notion-issue-sync',
    version='0.1.0',
    packages=packages,
    package_dir={'': 'src'},
    install_requires=requirements,
    extras_require={
        'test': ['pytest>=7.0', 'responses>=0.23'],
    },
    entry_points={
        'console_scripts': ['notion-issue-sync=issue_sync.cli:main'],
    },
    python_requires='>=3.8',
    description='Synchronise GitHub issue events with pages in a Notion database',
)
