"""Campaign log and election snapshots."""
