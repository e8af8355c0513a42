"""Flask app for the NamesLoL name checker."""

import logging
from datetime import datetime, timezone

from flask import Flask, flash, redirect, render_template, request, url_for

import config
import decay
from ads import BOTTOM_SLOT_ID, TOP_SLOT_ID, AdConfig
from lookup import DEFAULT_REGION, Region, SummonerQuery, lookup
from navigation import ERROR_MESSAGE, MIN_NAME_LENGTH, PageProps

logger = logging.getLogger(__name__)

settings = config.settings_from_env()

app = Flask(__name__)
app.config.update(
    SECRET_KEY=settings.secret_key,
    NAMESLOL_API_URL=settings.api_url,
    NAMESLOL_TIMEOUT=settings.timeout,
    ENVIRONMENT=settings.environment,
)


# --- Page routes ---


@app.route("/")
def index():
    return redirect(url_for("name_checker"))


@app.route("/lol-name-checker")
def name_checker():
    query = SummonerQuery.from_args(request.args)
    outcome = None
    if query:
        # One canonical lowercase URL per search
        if (request.args.get("region"), request.args.get("name")) != (query.region, query.name):
            return redirect(query.to_url())
        outcome = lookup(
            query,
            base_url=app.config["NAMESLOL_API_URL"],
            timeout=app.config["NAMESLOL_TIMEOUT"],
        )
        if outcome.error:
            flash(ERROR_MESSAGE, "error")

    props = PageProps(query=query, outcome=outcome)

    # Recomputed per request; "now" moves between renders
    status = None
    if props.found:
        status = decay.derive(outcome.record, datetime.now(timezone.utc))

    name = query.name if query else ""
    region = query.region_label if query else DEFAULT_REGION.name
    ad_config = AdConfig.for_environment(app.config["ENVIRONMENT"] == "production")

    return render_template(
        "lol_name_checker.html",
        props=props,
        record=outcome.record if outcome else None,
        status=status,
        name=name,
        region=region,
        regions=list(Region),
        min_name_length=MIN_NAME_LENGTH,
        ad_config=ad_config.to_provider(),
        top_slot=TOP_SLOT_ID,
        bottom_slot=BOTTOM_SLOT_ID,
    )


@app.template_filter("local_time")
def local_time_filter(dt):
    """MM/DD/YYYY hh:mm:ss AM/PM plus the server's local zone name."""
    return dt.astimezone().strftime("%m/%d/%Y %I:%M:%S %p %Z")


@app.template_filter("iso_time")
def iso_time_filter(dt):
    return dt.isoformat()


@app.template_filter("decay_formula")
def decay_formula_filter(level):
    return decay.decay_formula(level)


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    app.run(debug=not settings.production, host="127.0.0.1", port=5000)
