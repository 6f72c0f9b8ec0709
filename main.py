#!/usr/bin/env python
"""CLI for the Global News aggregator."""

from global_news.cli import main

if __name__ == "__main__":
    main()
