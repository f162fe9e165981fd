"""Progress context: course standings and proficiency levels."""
