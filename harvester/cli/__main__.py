"""Allow ``python -m harvester.cli`` execution."""

from harvester.cli.export import main

main()
