import json
import sys
from pathlib import Path

from astrocore.config import get_settings
from astrocore.routers.charts import natal_response
from astrocore.schemas import NatalRequest
from astrocore.services import ephem
from astrocore.services.chart import build_natal_chart


def main() -> None:
    in_path = Path(sys.argv[1])
    out_path = Path(sys.argv[2])
    req = NatalRequest.model_validate(json.loads(in_path.read_text(encoding="utf-8")))
    settings = get_settings()
    ephem.init_paths(settings.ephemeris_dir)
    chart = build_natal_chart(req.instant, req.lat, req.lon, ephem.SwissEphemeris(), ephem.SwissSiderealClock())
    output = natal_response(req, chart, settings).model_dump(mode="json")
    out_path.write_text(json.dumps(output, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote chart JSON → {out_path}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python cli.py input.json output.json")
        sys.exit(1)
    main()
