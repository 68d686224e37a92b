# Services package.
#
# Each module exposes async functions holding the query and write logic
# for one resource family:
#
#   listing_service  — CRUD + search/sort/offset listing for Listing
#   article_service  — the same for Article
#   comment_service  — cursor-paged comment threads under either parent
#   paging           — runs offset / cursor windows against a session
#
# All service functions take an AsyncSession as their first argument so
# the router layer controls the transaction boundary via ``get_db``.
# Missing records raise ``app.errors.NotFoundError``.
