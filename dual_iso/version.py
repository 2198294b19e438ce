version = "0.1.0"  # pylint:disable=invalid-name
