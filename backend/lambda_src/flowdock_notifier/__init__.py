"""Lambda function that relays events to the flowdock-notifier executable."""
