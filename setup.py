from setuptools import find_packages, setup

VERSION = "0.1.0"

requirements = [line.strip() for line in open("requirements.txt").readlines() if line.strip()]

if __name__ == "__main__":
    setup(
        name='create-pc-preset',
        version=VERSION,
        packages=find_packages(include=['pcpreset', 'pcpreset.*']),
        license='MIT',
        description='Scaffold a new Vue 3 front-end project from the PC preset template',
        long_description=open('README.md', encoding='utf-8').read(),
        long_description_content_type='text/markdown',
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: MIT License',
            'Programming Language :: Python :: 3',
        ],
        install_requires=requirements,
        extras_require={
            'test': ['pytest>=7.4', 'pytest-asyncio>=0.23'],
        },
        entry_points={
            'console_scripts': ['create-pc-preset=pcpreset.cli.main:run_preset'],
        },
        python_requires='>=3.9',
    )
