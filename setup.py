from setuptools import setup, find_packages
import lexgraph


with open('readme.rst') as f:
    long_description = f.read()


setup(
    name='lexgraph',
    description="Compile regular expressions into Thompson NFA graphs "
                "implemented in pure Python",
    long_description=long_description,
    version=lexgraph.__version__,
    include_package_data=True,
    packages=find_packages(exclude=["*.test.*", "test"]),
    python_requires='>=3.6',
    extras_require={
        'test': ['pytest', 'hypothesis'],
    },
    license='BSD',
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Compilers',
        'Topic :: Text Processing',
    ]
)
