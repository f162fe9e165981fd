"""Assessment context: quiz snapshots, attempts, evaluation and scoring."""
