"""External collaborators: git, package managers, docker, the Compact toolchain."""
