"""moodlog: mood journal analytics service."""
