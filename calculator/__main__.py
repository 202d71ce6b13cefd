#!/usr/bin/env python3

import sys

from . import configure_logging, parse_args, run

if __name__ == '__main__':
    args = parse_args()
    configure_logging(args)
    sys.exit(run(args))
