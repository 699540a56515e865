"""Allow `python -m conformcheck`."""

from conformcheck.presentation.cli import main

main()
