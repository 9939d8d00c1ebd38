"""Allow ``python -m calcline``."""

from calcline.cli import main

main()
