"""Session/identity handling for taskmirror."""
