"""
CLI Package.

Command-line tools for driving a CommandStack from replay scripts.
"""
