"""HTTP API for quoting batches and predicting instance addresses."""
