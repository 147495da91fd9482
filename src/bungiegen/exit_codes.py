"""Process exit statuses of the ``bungiegen`` command.

A build step that regenerates the client can branch on these without
scraping stderr: 7 means the document download or parse failed (retry or
pin a known-good copy), 8 means the output tree is in the way (a file where
``schemas/`` should be, or a permissions problem).

Warnings never change the status; a run that skipped endpoints still
exits 0.
"""

EXIT_SUCCESS = 0
EXIT_GENERIC_FAILURE = 1

# argument errors, including an --output path that names a file
EXIT_INVALID_USAGE = 2

EXIT_SPEC_PARSE_ERROR = 7
EXIT_OUTPUT_ERROR = 8

# Ctrl-C, 128 + SIGINT
EXIT_CANCELLED = 130
