# shopcenter/services/assistant.py
from typing import List, Protocol, Sequence

from sqlalchemy.orm import Session

from shopcenter.data.models.product import ProductModel
from shopcenter.domain.filters import ProductFilter
from shopcenter.domain.pricing import to_money
from shopcenter.domain.schemas import ChatMessage
from shopcenter.repos.category_repo import CategoryRepo
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)

FALLBACK_RESPONSE = (
    "I'm having trouble processing your request right now. "
    "Please try asking again or contact our support team for assistance."
)
CONTEXT_UNAVAILABLE = "Product information temporarily unavailable."

CONTEXT_PRODUCTS = 50
HISTORY_TURNS = 5
MAX_RECOMMENDATIONS = 5

PROMPT_TEMPLATE = """You are a helpful shopping assistant for ShopCenter, an e-commerce website. Help customers find products, answer questions, and provide recommendations.

Available Products and Categories:
{context}

Guidelines:
- Be friendly, helpful, and concise
- Recommend specific products when appropriate
- If asked about products not in our catalog, politely explain we don't carry them and suggest alternatives
- Help with sizing, features, comparisons, and general shopping advice
- If users want to search for something specific, suggest they use the search feature
- Keep responses under 200 words unless detailed explanations are needed

Current conversation context:
{history}

Customer message: {message}"""


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def _describe(product: ProductModel) -> str:
    summary = product.short_description or (product.description or "")[:100]
    line = f"{product.name} ({product.brand or 'No brand'}) - {summary} - ${to_money(product.price)}"
    if product.sale_price is not None:
        line += f" (Sale: ${to_money(product.sale_price)})"
    return line


class ShoppingAssistant:
    """
    Prompt wrapper around an external text generator, plus a keyword
    matcher that works without it.
    """

    def __init__(self, db: Session, generator: TextGenerator):
        self.products = ProductRepo(db)
        self.categories = CategoryRepo(db)
        self.generator = generator

    def product_context(self) -> str:
        try:
            products, _ = self.products.list_products(ProductFilter(limit=CONTEXT_PRODUCTS))
            categories = self.categories.list_categories()
        except Exception as e:
            logger.error(f"Error getting product context: {e}")
            return CONTEXT_UNAVAILABLE

        product_summary = "\n".join(_describe(p) for p in products)
        category_summary = "\n".join(f"{c.name}: {c.description or ''}" for c in categories)
        return f"Available Categories:\n{category_summary}\n\nSample Products:\n{product_summary}"

    def build_prompt(self, message: str, history: Sequence[ChatMessage] = ()) -> str:
        recent = list(history)[-HISTORY_TURNS:]
        return PROMPT_TEMPLATE.format(
            context=self.product_context(),
            history="\n".join(f"{m.role}: {m.content}" for m in recent),
            message=message,
        )

    def generate_response(self, message: str, history: Sequence[ChatMessage] = ()) -> str:
        try:
            return self.generator.generate(self.build_prompt(message, history))
        except Exception as e:
            logger.error(f"Error generating assistant response: {e}")
            return FALLBACK_RESPONSE

    def get_product_recommendations(self, query: str) -> List[ProductModel]:
        """Active products containing any of the query's keywords, first five."""
        keywords = query.lower().split()
        if not keywords:
            return []

        products, _ = self.products.list_products(ProductFilter())
        matches = []
        for product in products:
            text = " ".join(
                filter(None, [product.name, product.description, product.brand, product.short_description])
            ).lower()
            if any(keyword in text for keyword in keywords):
                matches.append(product)
                if len(matches) == MAX_RECOMMENDATIONS:
                    break
        return matches
