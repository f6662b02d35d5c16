"""Browser login flow: step sequencer, window tracking, cookie harvesting."""
