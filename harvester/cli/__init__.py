"""Command-line tools for the harvester.

- ``python -m harvester.cli export`` - harvest a collection (network or
  replay directory), optionally archive pages and verify URLs, and export
  the result as JSON or a Netscape bookmark file.

Uses argparse; heavy imports are deferred inside the handler so ``--help``
stays fast.
"""
