"""minicron — transactional edits of a remote host's /etc/crontab."""

__version__ = "0.1.0"
