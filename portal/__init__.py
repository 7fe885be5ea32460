"""Decision core of the certification assessment portal."""
