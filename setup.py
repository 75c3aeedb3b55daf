import setuptools

with open('README.md', 'rt') as f:
    long_description = f.read()

setuptools.setup(
    name='ratreal',
    version='0.0.0',
    description='exact rational arithmetic, and real numbers as refinable rational intervals',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    python_requires='>=3.10',
    install_requires=['gmpy2>=2.1.2'],
    extras_require={
        'test': ['pytest', 'pytest-asyncio'],
    },
    packages=['ratreal', 'ratreal.exact', 'ratreal.arithmetic'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'License :: OSI Approved :: MIT License',
    ],
)
