"""
The labels and fixed texts the bot reads and writes.

The places that add a label and the places that remove it must agree on the
name, so everything is spelled once, here.
"""

# Put on a pull request by a person: release when this merges.
PENDING_LABEL = "createrelease:pending"

# Replaces PENDING_LABEL once the release sequence has started.
MERGED_LABEL = "createrelease:merged"

# "Release v1.2.3"
RELEASE_NAME_PREFIX = "Release "

# "Release is at: https://github.com/..."
RELEASE_COMMENT_PREFIX = "Release is at:"

# The identity recorded as the tagger of annotated tags.
TAGGER_NAME = "Create Release Action"
TAGGER_EMAIL = "githubaction@github.com"
