"""HTTP API for the AI gateway and feedback analyzer."""
