"""Engine benchmarks — uses pytest-benchmark.

Run with::

    pytest tests/benchmarks/ -v --benchmark-sort=median

As plain functional tests::

    pytest tests/benchmarks/ --benchmark-disable
"""
