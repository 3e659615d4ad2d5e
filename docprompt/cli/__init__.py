"""Command-line interface for docprompt.

- ``python -m docprompt.cli`` (or the ``docprompt`` console script) —
  extract documents, build a prompt, and print the model's answer.

argparse is used for argument parsing; the CLI builds its own Settings and
components for each run since it is a one-shot process.
"""
