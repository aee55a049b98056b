"""Rehearsal Review API: team-based video review and annotation."""
