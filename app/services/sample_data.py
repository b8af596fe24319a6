"""Sample officials and staff for local development and fallback responses."""

import logging

from app.config import Settings
from app.services.local_store import LocalRecordStore

logger = logging.getLogger(__name__)


def _official(official_id, bioguide_id, first, last, party, state, district,
              phone, website, issues, twitter, instagram, facebook, updated):
    return {
        "Official_ID": official_id,
        "Bioguide_ID": bioguide_id,
        "First_Name": first,
        "Last_Name": last,
        "Full_Name": f"{first} {last}",
        "Party": party,
        "Office_Level": "Federal",
        "Chamber": "House",
        "State": state,
        "District": district,
        "Primary_Phone": phone,
        "Primary_Email": f"{first.lower()}.{last.lower()}@mail.house.gov",
        "Official_Website": website,
        "Official_Photo_URL": f"https://bioguide.congress.gov/bioguide/photo/{bioguide_id[0]}/{bioguide_id}.jpg",
        "Twitter_Handle": twitter,
        "Instagram_Handle": instagram,
        "Facebook_Handle": facebook,
        "Key_Issues": ", ".join(issues),
        "Average_Rating": 0,
        "Total_Ratings": 0,
        "Is_Current": True,
        "Data_Source": "Sample Data",
        "Last_Updated": updated,
    }


SAMPLE_OFFICIALS = [
    _official("OFF_0001", "A000370", "Alma", "Adams", "Democratic", "NC", "12th District",
              "(202) 225-1510", "https://adams.house.gov/",
              ["Education", "Healthcare", "Economic Justice"],
              "@RepAdams", "@repadams", "RepAdams", "2025-07-08"),
    _official("OFF_0002", "A000055", "Robert", "Aderholt", "Republican", "AL", "4th District",
              "(202) 225-4876", "https://aderholt.house.gov/",
              ["Fiscal Responsibility", "Defense", "Agriculture"],
              "@RobertAderholt", None, "RepAderholt", "2025-07-08"),
    _official("OFF_0003", "B001297", "Ken", "Buck", "Republican", "CO", "4th District",
              "(202) 225-4676", "https://buck.house.gov/",
              ["Judiciary", "Technology", "Small Business"],
              "@RepKenBuck", None, "RepKenBuck", "2025-07-07"),
    _official("OFF_0004", "C001053", "Tom", "Cole", "Republican", "OK", "4th District",
              "(202) 225-6165", "https://cole.house.gov/",
              ["Appropriations", "Native American Affairs", "Defense"],
              "@TomColeOK04", None, "TomColeOK04", "2025-07-07"),
    _official("OFF_0005", "D000624", "Debbie", "Dingell", "Democratic", "MI", "6th District",
              "(202) 225-4071", "https://debbiedingell.house.gov/",
              ["Healthcare", "Environment", "Women's Rights"],
              "@RepDebDingell", "@repdebdingell", "RepDebDingell", "2025-07-06"),
    _official("OFF_0006", "S001185", "Terri", "Sewell", "Democratic", "AL", "7th District",
              "(202) 225-2665", "https://sewell.house.gov/",
              ["Civil Rights", "Rural Development", "Healthcare"],
              "@RepTerriSewell", "@repterrisewell", "RepTerriSewell", "2025-07-06"),
    _official("OFF_0007", "W000826", "Susan", "Wild", "Democratic", "PA", "7th District",
              "(202) 225-6411", "https://wild.house.gov/",
              ["Government Accountability", "Healthcare", "Infrastructure"],
              "@RepSusanWild", "@repsusan_wild", "RepSusanWild", "2025-07-05"),
    _official("OFF_0008", "Y000033", "Don", "Young", "Republican", "AK", "At Large",
              "(202) 225-5765", "https://donyoung.house.gov/",
              ["Transportation", "Natural Resources", "Alaska Issues"],
              "@RepDonYoung", None, "CongressmanDonYoung", "2025-07-05"),
]


def _staff(staff_id, first, last, title, phone, office, areas, valid_from):
    return {
        "Staff_ID": staff_id,
        "First_Name": first,
        "Last_Name": last,
        "Full_Name": f"{first} {last}",
        "Job_Title": title,
        "Phone": phone,
        "Email": f"{first.lower()}.{last.lower()}@mail.house.gov",
        "Office_Location": office,
        "Policy_Areas": ", ".join(areas),
        "Valid_From_Date": valid_from,
        "Data_Source": "Demo Data",
        "Last_Updated": "2025-07-08",
    }


SAMPLE_STAFF = [
    _staff("STF_DEMO_001", "Sarah", "Johnson", "Chief of Staff", "(202) 225-0001",
           "Washington, DC", ["Administration", "Strategy", "Operations"], "2023-01-01"),
    _staff("STF_DEMO_002", "Michael", "Chen", "Communications Director", "(202) 225-0002",
           "Washington, DC", ["Media Relations", "Public Affairs", "Social Media"], "2023-01-01"),
    _staff("STF_DEMO_003", "Emily", "Rodriguez", "Legislative Assistant", "(202) 225-0003",
           "Washington, DC", ["Healthcare", "Education", "Immigration"], "2023-06-01"),
    _staff("STF_DEMO_004", "David", "Thompson", "District Director", "(704) 344-9500",
           "Charlotte, NC", ["Constituent Services", "Community Outreach", "Local Issues"], "2022-01-01"),
]


async def seed_sample_data(store: LocalRecordStore, settings: Settings) -> int:
    """Load the sample officials and staff into an empty local store.

    Returns the number of records created.
    """
    if not await store.is_empty(settings.officials_table):
        return 0

    created = 0
    for fields in SAMPLE_OFFICIALS:
        await store.create(settings.officials_table, fields)
        created += 1

    # Sample staff all work for the first sample official
    first = SAMPLE_OFFICIALS[0]
    for fields in SAMPLE_STAFF:
        await store.create(
            settings.staff_table,
            {**fields, "Official_Link": first["Official_ID"], "Bioguide_ID": first["Bioguide_ID"]},
        )
        created += 1

    logger.info("Seeded local store with %d sample records", created)
    return created
