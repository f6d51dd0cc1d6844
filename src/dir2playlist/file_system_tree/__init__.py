"""Media tree representation of one or more library roots.

This package builds the ordered, pruned and deduplicated tree of directories and
video files that the playlist serializer renders.
"""
