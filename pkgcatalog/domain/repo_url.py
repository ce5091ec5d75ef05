from typing import Tuple

from pkgcatalog.domain.errors import InvalidRepoURL

HTTPS_PREFIX = "https://github.com/"
SSH_PREFIX = "git@github.com:"


def parse_repo_url(url: str) -> Tuple[str, str]:
    """
    Extract ``(owner, repo)`` from a GitHub repository URL.

    Accepted shapes:
    * https://github.com/owner/repo
    * https://github.com/owner/repo.git
    * git@github.com:owner/repo.git

    Parsing is purely lexical; nothing checks that the repository exists.
    """
    for prefix in (HTTPS_PREFIX, SSH_PREFIX):
        if len(url) > len(prefix) and url.startswith(prefix):
            parts = url[len(prefix):].split("/")
            if len(parts) >= 2:
                owner, repo = parts[0], parts[1]
                if repo.endswith(".git"):
                    repo = repo[: -len(".git")]
                if owner and repo:
                    return owner, repo

    raise InvalidRepoURL(url)


def github_url(owner: str, repo: str) -> str:
    return f"{HTTPS_PREFIX}{owner}/{repo}"
