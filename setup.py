from setuptools import setup, find_packages

setup(
    name='vueify-py',
    version='0.1.0',
    py_modules=['vueify', 'compiler'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'beautifulsoup4>=4.11',
        'lark',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'vueify = vueify:main',
        ],
    },
)
