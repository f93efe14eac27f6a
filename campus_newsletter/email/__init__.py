"""Preview email delivery."""
