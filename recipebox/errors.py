class RecipeParseError(Exception):
    """Base class for import pipeline failures surfaced to the caller."""

    user_message = "Could not import recipe."


class InvalidURL(RecipeParseError):
    user_message = "Invalid URL."

    def __init__(self, url: str = ""):
        super().__init__(f"Invalid URL: {url!r}")
        self.url = url


class FetchFailed(RecipeParseError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    @property
    def user_message(self) -> str:
        return f"Could not fetch page: {self.reason}"


class NoRecipeFound(RecipeParseError):
    user_message = "No recipe found on that page."


class ParsingFailed(RecipeParseError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    @property
    def user_message(self) -> str:
        return f"Could not read recipe: {self.reason}"


class DecisionAlreadyResolved(Exception):
    """A duplicate decision was answered more than once."""
