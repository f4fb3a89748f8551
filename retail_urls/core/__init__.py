"""URL resolution, srcset parsing and tree absolutizing."""
