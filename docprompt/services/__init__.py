"""Business logic: document extraction, prompt resolution, response decoding."""
