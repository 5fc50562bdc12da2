"""
Google PageSpeed Insights API Client

Fetches the raw runPagespeed response (Lighthouse lab data plus CrUX field
data) that the report pipeline renders.
API Documentation: https://developers.google.com/speed/docs/insights/v5/get-started

Rate Limits:
- 400 requests per 100 seconds
- 25,000 requests per day (free tier)
"""

import logging
from typing import Any, Dict, Optional

import httpx

from psi_report.constants import DEFAULT_STRATEGY, STRATEGIES
from psi_report.exceptions import ConfigurationError, PSIRequestError

logger = logging.getLogger(__name__)


class PageSpeedInsightsAPI:
    """Client for Google PageSpeed Insights API v5"""

    API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
    TIMEOUT_SECONDS = 120.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        strategy: str = DEFAULT_STRATEGY,
        locale: str = "en",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize PageSpeed Insights API client.

        Args:
            api_key: Google API key; anonymous requests are allowed but heavily rate limited
            strategy: 'mobile' or 'desktop' analysis
            locale: Locale for audit titles and descriptions (default: 'en')
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_key = api_key
        self.strategy = self._validate_strategy(strategy)
        self.locale = locale
        self.transport = transport

        self.total_requests = 0
        self.failed_requests = 0

    @staticmethod
    def _validate_strategy(strategy: str) -> str:
        if strategy not in STRATEGIES:
            raise ConfigurationError(f"Strategy must be one of {', '.join(STRATEGIES)}, got '{strategy}'")
        return strategy

    def _build_params(self, url: str, strategy: str) -> Dict[str, Any]:
        params = {
            'url': url,
            'strategy': strategy,
            'category': 'performance',
            'locale': self.locale,
        }
        if self.api_key:
            params['key'] = self.api_key
        return params

    async def fetch(self, url: str, strategy: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch the raw PageSpeed Insights response for a URL.

        Args:
            url: URL to analyze
            strategy: Override default strategy ('mobile' or 'desktop')

        Returns:
            Decoded JSON response, unmodified

        Raises:
            PSIRequestError: On timeout, HTTP error status or an undecodable body
        """
        strategy = self._validate_strategy(strategy or self.strategy)
        params = self._build_params(url, strategy)

        self.total_requests += 1
        try:
            async with httpx.AsyncClient(timeout=self.TIMEOUT_SECONDS, transport=self.transport) as client:
                logger.info(f"[PSI] Analyzing {url} ({strategy})")
                response = await client.get(self.API_URL, params=params)
                response.raise_for_status()
                data = response.json()

        except httpx.TimeoutException:
            self.failed_requests += 1
            logger.error(f"[PSI] Timeout analyzing {url} (>{self.TIMEOUT_SECONDS:.0f}s)")
            raise PSIRequestError(f"PageSpeed Insights timeout for {url}")

        except httpx.HTTPStatusError as e:
            self.failed_requests += 1
            status = e.response.status_code
            if status == 429:
                logger.error(f"[PSI] Rate limit exceeded for {url}")
                raise PSIRequestError("PageSpeed Insights rate limit exceeded. Try again later.", status)
            elif status == 400:
                logger.error(f"[PSI] Invalid URL or parameters: {url}")
                raise PSIRequestError(f"Invalid URL for PageSpeed Insights: {url}", status)
            else:
                logger.error(f"[PSI] API error {status} for {url}")
                raise PSIRequestError(f"PageSpeed Insights API error {status} for {url}", status)

        except httpx.HTTPError as e:
            self.failed_requests += 1
            error_msg = str(e) if str(e) else type(e).__name__
            logger.error(f"[PSI] Error analyzing {url}: {error_msg}")
            raise PSIRequestError(f"PageSpeed Insights request failed for {url}: {error_msg}")

        except ValueError:
            self.failed_requests += 1
            logger.error(f"[PSI] Response for {url} is not valid JSON")
            raise PSIRequestError(f"PageSpeed Insights returned an invalid response for {url}")

        return data

    def get_stats(self) -> Dict[str, float]:
        """Get API usage statistics"""
        return {
            'total_requests': self.total_requests,
            'failed_requests': self.failed_requests,
            'success_rate': (
                round((self.total_requests - self.failed_requests) / self.total_requests * 100, 1)
                if self.total_requests > 0 else 0
            ),
        }
