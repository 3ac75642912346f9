"""Agent scripts driving the gymnasium environment."""
