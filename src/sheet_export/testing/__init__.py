"""Testing helpers – in-memory fakes for every export collaborator."""
