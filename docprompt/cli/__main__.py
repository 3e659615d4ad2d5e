"""Allow ``python -m docprompt.cli`` execution."""

from docprompt.cli.ask import main

main()
