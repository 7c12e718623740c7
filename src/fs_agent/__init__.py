"""Filesystem agent: structure walks, file contents and live watches over HTTP."""
