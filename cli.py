import argparse
import json
from dataclasses import replace
from typing import Any

from config.settings import get_settings
from db.client import get_client
from db.repos.blog_posts_repo import BlogPostsRepo
from db.repos.company_settings_repo import BrandingRepo, CompanySettingsRepo
from db.repos.properties_repo import PropertiesRepo
from models.filters import PropertyFilters
from services.company_settings import CompanySettingsService
from utils.logging_setup import init_logging


def _backend(args):
    settings = get_settings()
    if getattr(args, "fixtures", None):
        settings = replace(settings, fixtures_path=args.fixtures)
    return get_client(settings)


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _filters_from_args(args) -> PropertyFilters:
    return PropertyFilters(
        property_type=args.type,
        min_price=args.min_price,
        max_price=args.max_price,
        city=args.city,
        bedrooms=args.bedrooms,
        featured=True if args.featured else None,
    )


def cmd_company(args):
    service = CompanySettingsService(CompanySettingsRepo(_backend(args)))
    state = service.load()

    def _dump(view):
        return view.model_dump() if view is not None else None

    _print({
        "display_name": service.display_name,
        "error": state.error,
        "company": _dump(state.company),
        "address": _dump(service.address),
        "formatted_address": service.formatted_address(),
        "contact": _dump(service.contact),
        "business": _dump(service.business),
        "social": _dump(service.social),
        "branding": _dump(service.branding),
    })


def cmd_branding(args):
    _print(BrandingRepo(_backend(args)).fetch_branding())


def cmd_properties(args):
    _print(PropertiesRepo(_backend(args)).fetch_properties(_filters_from_args(args)))


def cmd_property(args):
    _print(PropertiesRepo(_backend(args)).fetch_property(args.slug))


def cmd_featured(args):
    _print(PropertiesRepo(_backend(args)).fetch_featured_properties(args.limit))


def cmd_search(args):
    _print(PropertiesRepo(_backend(args)).search_properties(args.term, _filters_from_args(args)))


def cmd_types(args):
    _print(PropertiesRepo(_backend(args)).fetch_property_types())


def cmd_cities(args):
    _print(PropertiesRepo(_backend(args)).fetch_cities())


def cmd_blog(args):
    _print(BlogPostsRepo(_backend(args)).fetch_blog_posts(args.limit))


def cmd_blog_post(args):
    _print(BlogPostsRepo(_backend(args)).fetch_blog_post(args.slug))


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--type", default=None, help="Property type (exact match)")
    p.add_argument("--min-price", type=float, default=None)
    p.add_argument("--max-price", type=float, default=None)
    p.add_argument("--city", default=None, help="City (exact match)")
    p.add_argument("--bedrooms", type=int, default=None, help="Minimum bedrooms")
    p.add_argument("--featured", action="store_true", help="Only featured listings")


def main(argv=None):
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Realty site data CLI")
    parser.add_argument("--fixtures", default=None, help="JSON fixtures file; skips the remote backend")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_co = sub.add_parser("company", help="Load company settings and derived views")
    p_co.set_defaults(func=cmd_company)

    p_br = sub.add_parser("branding", help="Show the branding row")
    p_br.set_defaults(func=cmd_branding)

    p_props = sub.add_parser("properties", help="List published properties")
    _add_filter_args(p_props)
    p_props.set_defaults(func=cmd_properties)

    p_prop = sub.add_parser("property", help="Show one published property by slug")
    p_prop.add_argument("slug")
    p_prop.set_defaults(func=cmd_property)

    p_feat = sub.add_parser("featured", help="List featured properties")
    p_feat.add_argument("--limit", type=int, default=6)
    p_feat.set_defaults(func=cmd_featured)

    p_search = sub.add_parser("search", help="Search title, description and neighborhood")
    p_search.add_argument("term")
    _add_filter_args(p_search)
    p_search.set_defaults(func=cmd_search)

    p_types = sub.add_parser("types", help="Distinct property types")
    p_types.set_defaults(func=cmd_types)

    p_cities = sub.add_parser("cities", help="Distinct cities, sorted")
    p_cities.set_defaults(func=cmd_cities)

    p_blog = sub.add_parser("blog", help="List published blog posts")
    p_blog.add_argument("--limit", type=int, default=None)
    p_blog.set_defaults(func=cmd_blog)

    p_post = sub.add_parser("blog-post", help="Show one published blog post by slug")
    p_post.add_argument("slug")
    p_post.set_defaults(func=cmd_blog_post)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
