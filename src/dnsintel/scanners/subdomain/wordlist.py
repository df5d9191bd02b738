"""Common subdomain labels probed when CT logs come up short."""

COMMON_SUBDOMAINS: tuple[str, ...] = (
    # Web and mail
    "www", "mail", "webmail", "ftp", "smtp", "pop", "imap",
    "admin", "portal", "api", "dev", "staging", "test", "demo",
    "blog", "shop", "store", "cdn", "static", "assets", "images",
    "app", "mobile", "m", "vpn", "remote", "secure", "login",
    # Identity and docs
    "auth", "sso", "id", "accounts", "support", "help", "docs",
    # DNS and mail exchangers
    "ns1", "ns2", "dns", "dns1", "dns2", "mx", "mx1", "mx2",
    # Hosting panels
    "cpanel", "whm", "plesk", "server", "host", "cloud",
    # Monitoring
    "status", "monitor", "metrics", "analytics", "tracking",
    "grafana", "prometheus",
    # Source control and CI
    "git", "gitlab", "github", "bitbucket", "jenkins", "ci", "svn",
    # Data stores
    "db", "database", "mysql", "postgres", "redis", "mongo",
    # Lifecycle
    "backup", "bak", "old", "new", "beta", "alpha", "stage",
    "internal", "intranet", "extranet", "private", "public",
    # Collaboration and media
    "jira", "wiki", "confluence", "media", "video", "img",
)
