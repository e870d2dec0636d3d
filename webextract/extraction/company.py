import json
import logging
import re
from datetime import datetime
from urllib.parse import urldefrag, urljoin, urlparse

import requests
from bs4 import BeautifulSoup

from webextract.exceptions import FetchError
from webextract.extraction.base import BaseExtractor, ProgressCallback
from webextract.utils.data_helpers import fetch_page, normalize_text, unique

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp")
TITLE_SEPARATORS = re.compile(r"\s+[|\-–—:·]\s+")
LINK_KEYWORDS = ("product", "service", "solution", "about", "company", "shop", "catalog")
ORGANIZATION_TYPES = {"Organization", "Corporation", "LocalBusiness", "Store", "Brand"}
SOCIAL_HOSTS = {
    "linkedin.com": "linkedin",
    "twitter.com": "twitter",
    "x.com": "twitter",
    "facebook.com": "facebook",
    "instagram.com": "instagram",
    "youtube.com": "youtube",
    "github.com": "github",
}


def _host(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def _types(item: dict) -> set[str]:
    value = item.get("@type", [])
    if isinstance(value, str):
        return {value}
    if isinstance(value, list):
        return {entry for entry in value if isinstance(entry, str)}
    return set()


def _text(value) -> str:
    """Return the first string held by a JSON-LD value, or an empty string."""
    if isinstance(value, list):
        value = next((entry for entry in value if isinstance(entry, str)), "")
    return value if isinstance(value, str) else ""


def _json_ld_items(soup: BeautifulSoup) -> list[dict]:
    items = []
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            payload = json.loads(script.string or "")
        except json.JSONDecodeError:
            logger.debug("Skipping malformed JSON-LD block")
            continue
        stack = payload if isinstance(payload, list) else [payload]
        while stack:
            item = stack.pop(0)
            if not isinstance(item, dict):
                continue
            graph = item.get("@graph")
            if isinstance(graph, list):
                stack.extend(graph)
            elif isinstance(graph, dict):
                stack.append(graph)
            items.append(item)
    return items


def _meta(soup: BeautifulSoup, *keys: str) -> str:
    for key in keys:
        tag = soup.find("meta", attrs={"property": key}) or soup.find(
            "meta", attrs={"name": key}
        )
        if tag and tag.get("content"):
            return normalize_text(tag["content"])
    return ""


class CompanyProductExtractor(BaseExtractor):
    """
    Extract company details and product listings from a company website.

    The landing page is always parsed. Up to ``max_pages - 1`` additional
    same-site pages whose link mentions products, services or the company
    are visited afterwards.
    """

    def extract(
        self,
        url: str,
        config: dict,
        extraction_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> dict | None:
        timeout = config.get("request_timeout", 30)
        user_agent = config.get("user_agent")
        max_pages = max(1, int(config.get("max_pages", 5)))

        with requests.Session() as session:
            self.report(progress, 15, "Fetching landing page")
            html = fetch_page(url, timeout=timeout, user_agent=user_agent, session=session)

            self.report(progress, 20, "Parsing landing page")
            soup = BeautifulSoup(html, "html.parser")
            company = self.extract_company(soup, url)
            products = self.extract_products(soup, url)
            pages_visited = [url]

            links = self.find_candidate_links(soup, url)[: max_pages - 1]
            for index, link in enumerate(links, start=1):
                percent = 20 + int(70 * index / (len(links) + 1))
                self.report(progress, percent, f"Scanning page {index}/{len(links)}")
                try:
                    page_html = fetch_page(
                        link, timeout=timeout, user_agent=user_agent, session=session
                    )
                except FetchError as e:
                    logger.warning(f"Skipping {link}: {e}")
                    continue
                page_soup = BeautifulSoup(page_html, "html.parser")
                pages_visited.append(link)
                self.merge_company(company, self.extract_company(page_soup, link))
                products.extend(
                    self.extract_products(page_soup, link, product_page=True)
                )

        self.report(progress, 90, "Consolidating results")
        products = self.deduplicate_products(products)

        found_company = any(
            [company["name"], company["description"], company["emails"], company["phones"]]
        )
        if not found_company and not products:
            logger.info(f"Nothing extracted from {url}")
            return None

        return {
            "url": url,
            "extraction_id": extraction_id,
            "company": company,
            "products": products,
            "pages_visited": pages_visited,
            "extracted_at": datetime.now().isoformat(),
        }

    def extract_company(self, soup: BeautifulSoup, page_url: str) -> dict:
        organization = next(
            (item for item in _json_ld_items(soup) if _types(item) & ORGANIZATION_TYPES),
            {},
        )

        name = _meta(soup, "og:site_name") or normalize_text(_text(organization.get("name")))
        if not name and soup.title and soup.title.string:
            name = TITLE_SEPARATORS.split(normalize_text(soup.title.string))[0]

        description = _meta(soup, "description", "og:description") or normalize_text(
            _text(organization.get("description"))
        )

        logo = organization.get("logo")
        if isinstance(logo, dict):
            logo = logo.get("url")
        logo = _text(logo)
        if logo:
            logo = urljoin(page_url, logo)

        emails = [
            a["href"][len("mailto:"):].split("?")[0]
            for a in soup.select('a[href^="mailto:"]')
        ]
        emails += [
            email
            for email in EMAIL_PATTERN.findall(soup.get_text(" "))
            if not email.lower().endswith(IMAGE_SUFFIXES)
        ]
        if _text(organization.get("email")):
            emails.append(_text(organization["email"]).replace("mailto:", ""))

        phones = [normalize_text(a["href"][len("tel:"):]) for a in soup.select('a[href^="tel:"]')]
        if _text(organization.get("telephone")):
            phones.append(normalize_text(_text(organization["telephone"])))

        same_as = organization.get("sameAs", [])
        if isinstance(same_as, str):
            same_as = [same_as]
        if not isinstance(same_as, list):
            same_as = []
        same_as = [href for href in same_as if isinstance(href, str)]
        social_links = {}
        for href in [a["href"] for a in soup.find_all("a", href=True)] + same_as:
            network = SOCIAL_HOSTS.get(_host(href))
            if network and network not in social_links:
                social_links[network] = href

        return {
            "name": name or None,
            "description": description or None,
            "logo": logo or None,
            "emails": unique([email.lower() for email in emails]),
            "phones": unique(phones),
            "social_links": social_links,
        }

    def merge_company(self, company: dict, other: dict) -> dict:
        for key in ("name", "description", "logo"):
            if not company.get(key) and other.get(key):
                company[key] = other[key]
        company["emails"] = unique(company["emails"] + other["emails"])
        company["phones"] = unique(company["phones"] + other["phones"])
        for network, href in other["social_links"].items():
            company["social_links"].setdefault(network, href)
        return company

    def extract_products(
        self, soup: BeautifulSoup, page_url: str, product_page: bool = False
    ) -> list[dict]:
        products = []
        for item in _json_ld_items(soup):
            name = normalize_text(_text(item.get("name")))
            if "Product" not in _types(item) or not name:
                continue
            offers = item.get("offers") or {}
            if isinstance(offers, list):
                offers = next((offer for offer in offers if isinstance(offer, dict)), {})
            if not isinstance(offers, dict):
                offers = {}
            price = offers.get("price")
            if isinstance(price, (dict, list)):
                price = None
            products.append(
                {
                    "name": name,
                    "description": normalize_text(_text(item.get("description"))) or None,
                    "price": str(price) if price is not None else None,
                    "currency": _text(offers.get("priceCurrency")) or None,
                    "url": urljoin(page_url, _text(item.get("url")) or page_url),
                }
            )

        if products or not product_page:
            return products

        # Pages without structured data: product cards are the usual markup.
        for card in soup.select('[class*="product"], [id*="product"]'):
            heading = card.find(["h2", "h3", "h4"])
            if heading is None:
                continue
            paragraph = card.find("p")
            link = card.find("a", href=True)
            products.append(
                {
                    "name": normalize_text(heading.get_text(" ")),
                    "description": normalize_text(paragraph.get_text(" ")) if paragraph else None,
                    "price": None,
                    "currency": None,
                    "url": urljoin(page_url, link["href"]) if link else page_url,
                }
            )
        return [product for product in products if product["name"]]

    def deduplicate_products(self, products: list[dict]) -> list[dict]:
        seen = {}
        for product in products:
            seen.setdefault(product["name"].lower(), product)
        return list(seen.values())

    def find_candidate_links(self, soup: BeautifulSoup, page_url: str) -> list[str]:
        site = _host(page_url)
        landing = urldefrag(page_url)[0].rstrip("/")
        links = []
        for anchor in soup.find_all("a", href=True):
            link = urldefrag(urljoin(page_url, anchor["href"]))[0]
            if urlparse(link).scheme not in ("http", "https") or _host(link) != site:
                continue
            if link.rstrip("/") == landing:
                continue
            haystack = f"{urlparse(link).path} {anchor.get_text(' ')}".lower()
            if any(keyword in haystack for keyword in LINK_KEYWORDS):
                links.append(link)
        return unique(links)
