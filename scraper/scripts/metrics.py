#!/usr/bin/env python3
"""
Print simple operational metrics for the ad archive scraper's Postgres sink.

Usage examples:
  python scripts/metrics.py --db-host 127.0.0.1
  python scripts/metrics.py --sql-conn your-project:your-region:your-instance
"""
import argparse

from ad_archive_scraper.db import DEFAULT_TABLE, sql_connect

DEFAULT_SQL_CONN = "your-project:your-region:your-instance"


def sections(table):
    return [
        ("Status counts", f"SELECT status, COUNT(*) AS count FROM {table} GROUP BY status ORDER BY count DESC"),
        (
            "Creative types (SUCCESS)",
            f"SELECT creative_type, COUNT(*) AS count FROM {table} WHERE status = 'SUCCESS' GROUP BY creative_type ORDER BY count DESC",
        ),
        (
            "Field coverage (SUCCESS)",
            f"""
            SELECT COUNT(*)                                     AS records,
                   COUNT(creative_url)                          AS creative_url,
                   COUNT(cta_url)                               AS cta_url,
                   COUNT(cta_text)                              AS cta_text,
                   COUNT(advertiser_name)                       AS advertiser_name,
                   COUNT(library_id)                            AS library_id,
                   COUNT(ad_text)                               AS ad_text,
                   SUM(CASE WHEN is_sponsored THEN 1 ELSE 0 END) AS sponsored
              FROM {table}
             WHERE status = 'SUCCESS'
            """,
        ),
        (
            "Creative strategy usage",
            f"SELECT provenance->>'creative' AS strategy, COUNT(*) AS count FROM {table} "
            "WHERE status = 'SUCCESS' GROUP BY 1 ORDER BY count DESC",
        ),
        (
            "Top errors",
            f"SELECT status, error, COUNT(*) AS count FROM {table} WHERE status <> 'SUCCESS' "
            "GROUP BY status, error ORDER BY count DESC LIMIT 20",
        ),
        (
            "Throughput (last 14 days)",
            f"SELECT DATE(inserted_at) AS day, COUNT(*) AS count FROM {table} "
            "WHERE inserted_at >= CURRENT_DATE - INTERVAL '14 days' GROUP BY 1 ORDER BY day DESC",
        ),
    ]


def run_query(con, sql):
    with con.cursor() as cur:
        cur.execute(sql)
        cols = [d[0] for d in cur.description]
        rows = cur.fetchall()
    return cols, rows


def print_table(title, cols, rows):
    print(f"\n== {title} ==")
    if not rows:
        print("(no rows)")
        return
    widths = [max(len(str(c)), max((len(str(r[i])) for r in rows), default=0)) for i, c in enumerate(cols)]
    fmt = "  " + " | ".join("{:<" + str(w) + "}" for w in widths)
    print(fmt.format(*cols))
    print("  " + "-+-".join("-" * w for w in widths))
    for r in rows:
        print(fmt.format(*[str(x) for x in r]))


def main():
    ap = argparse.ArgumentParser(description="Print ad archive scraper metrics from Postgres")
    ap.add_argument("--sql-conn", default=DEFAULT_SQL_CONN, help="Cloud SQL connection name if using sockets")
    ap.add_argument("--db-host", help="Host for TCP connection (e.g., 127.0.0.1 when using cloud-sql-proxy)")
    ap.add_argument("--db-port", type=int)
    ap.add_argument("--table", default=DEFAULT_TABLE)
    args = ap.parse_args()

    con = sql_connect(args.sql_conn, args.db_host, args.db_port)

    for title, sql in sections(args.table):
        try:
            cols, rows = run_query(con, sql)
            print_table(title, cols, rows)
        except Exception as e:
            con.rollback()
            print(f"\n== {title} ==\nERROR: {e}")

    con.close()


if __name__ == "__main__":
    main()
