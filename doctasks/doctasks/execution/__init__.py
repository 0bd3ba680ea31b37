"""Running external tools and handing rules to the build host."""
