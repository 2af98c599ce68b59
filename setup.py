import setuptools

setuptools.setup(
    name='lexgen',
    version='0.1.dev0',
    license='MIT Licence',
    description='Lexer generator based on Thompson and subset constructions',
    packages=setuptools.find_packages(exclude=['tests', 'examples']),
    python_requires='>=3.7',
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['lexgen=lexgen.__main__:main'],
    },
    zip_safe=False,
)
