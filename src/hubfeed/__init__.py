"""hubfeed: a terminal social feed over the GitHub API.

Signs you in through Supabase, binds the account to a GitHub username and
shows a feed of your followers' repositories, profile pages and repo details.
"""

__version__ = "0.1.0"
