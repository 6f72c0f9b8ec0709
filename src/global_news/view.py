"""Plain-text rendering of the query state."""

from global_news.data import COUNTRY_NAMES, Article, QueryState

DESCRIPTION_PLACEHOLDER = "No description available."
DEFAULT_FOOTER = "Global News Aggregator"
LOADING_MESSAGE = "Loading news..."
EMPTY_MESSAGE = "No news articles found."


def render_article(
    article: Article,
    index: int | None = None,
    *,
    placeholder: str = DESCRIPTION_PLACEHOLDER,
) -> str:
    """Render a single article card.

    The image line is omitted when the article has no image URL.
    """
    heading = f"{index}. {article.title}" if index is not None else article.title
    lines = [heading]
    if article.url_to_image:
        lines.append(f"   Image: {article.url_to_image}")
    lines.append(f"   {article.description or placeholder}")
    lines.append(f"   Read more: {article.url}")
    return "\n".join(lines)


def render_state(
    state: QueryState,
    *,
    placeholder: str = DESCRIPTION_PLACEHOLDER,
    footer: str = DEFAULT_FOOTER,
) -> str:
    """Render the full view: loading line, error banner, cards, notice and footer."""
    blocks: list[str] = []
    if state.loading:
        blocks.append(LOADING_MESSAGE)
    if state.error:
        blocks.append(f"! {state.error}")
    if not state.loading and state.articles:
        blocks.extend(
            render_article(article, i, placeholder=placeholder)
            for i, article in enumerate(state.articles, 1)
        )
    if not state.loading and not state.articles and not state.error:
        blocks.append(EMPTY_MESSAGE)
    blocks.append(f"-- {footer} --")
    return "\n\n".join(blocks)


def format_country_menu(selected: str | None = None) -> str:
    """List the selectable countries, marking the current one."""
    lines = []
    for country, name in COUNTRY_NAMES.items():
        marker = "*" if country == selected else " "
        lines.append(f"{marker} {country.value}  {name}")
    return "\n".join(lines)
