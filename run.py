"""Entry point for the cache simulator.

Usage:
    python run.py [-v] -s <s> -E <E> -b <b> -t <trace>
    python run.py -h
"""
from csim.cli import main


if __name__ == '__main__':
    main()
