from setuptools import setup, find_namespace_packages

setup(
    name='revision_tagger',
    version='0.1',
    package_dir={'': 'src'},
    packages=find_namespace_packages(where='src'),  # Packages carry no __init__.py
    install_requires=[
        'Click',
        'PyYAML',
        'docker',
        'Jinja2',
        'pydantic>=2',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-mock',
        ],
    },
    entry_points='''
        [console_scripts]
        revision-tagger=revision_tagger.cli:cli
    ''',
)
