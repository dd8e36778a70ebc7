"""Receiver configuration commands sent once at startup.

These are static payloads: pre-checksummed sentences plus one raw u-blox
binary block. Checksums were generated offline; nothing in this package
formats outgoing sentences.

PMTK commands target MediaTek-based receivers, PUBX commands target u-blox
receivers. A receiver silently ignores the family it does not understand,
so the default startup sequence mixes both.
"""

# --- PMTK: NMEA output rate ---------------------------------------------------
# These only control how often sentences are echoed; the fix rate below must
# be raised as well to actually get faster position updates.

PMTK_SET_NMEA_UPDATE_1HZ = b"$PMTK220,1000*1F\r\n"
PMTK_SET_NMEA_UPDATE_5HZ = b"$PMTK220,200*2C\r\n"
PMTK_SET_NMEA_UPDATE_10HZ = b"$PMTK220,100*2F\r\n"

# --- PMTK: position fix rate (5 Hz is the maximum) ----------------------------

PMTK_API_SET_FIX_CTL_1HZ = b"$PMTK300,1000,0,0,0,0*1C\r\n"
PMTK_API_SET_FIX_CTL_5HZ = b"$PMTK300,200,0,0,0,0*2F\r\n"

# --- PMTK: baud rate ----------------------------------------------------------

PMTK_SET_BAUD_57600 = b"$PMTK251,57600*2C\r\n"
PMTK_SET_BAUD_9600 = b"$PMTK251,9600*17\r\n"

# --- PMTK: sentence selection -------------------------------------------------

PMTK_SET_NMEA_OUTPUT_GGAVTG = b"$PMTK314,0,0,1,1,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0*28\r\n"
PMTK_SET_NMEA_OUTPUT_ALLDATA = b"$PMTK314,1,1,1,1,1,1,0,0,0,0,0,0,0,0,0,0,0,0,0*28\r\n"
PMTK_SET_NMEA_OUTPUT_OFF = b"$PMTK314,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0*28\r\n"

# --- PMTK: differential corrections and queries -------------------------------

PMTK_ENABLE_SBAS = b"$PMTK313,1*2E\r\n"
PMTK_ENABLE_WAAS = b"$PMTK301,2*2E\r\n"
PMTK_Q_RELEASE = b"$PMTK605*31\r\n"

PGCMD_ANTENNA = b"$PGCMD,33,1*6C\r\n"
PGCMD_NOANTENNA = b"$PGCMD,33,0*6D\r\n"

# --- UBX: u-blox binary NMEA protocol configuration --------------------------
# Raw CFG-NMEA payload, sent before any PUBX sentence.

UBX_CFG_NMEA = bytes(
    (0x17, 0x20, 0x18, 0x40, 0x08, 0x01, 0x00, 0x00,
     0x00, 0x76, 0x00, 0x01, 0x01, 0x01, 0x00, 0x00)
)

# --- PUBX: u-blox port and per-sentence rates ---------------------------------

PUBX_CONFIG_NMEA = b"$PUBX,41,1,07,03,9600,0*10\r\n"
PUBX_SET_GGA = b"$PUBX,40,GGA,0,1,0,0,0,0*5B\r\n"
PUBX_SET_VTG = b"$PUBX,40,VTG,0,1,0,0,0,0*5F\r\n"
PUBX_SET_RMC_OFF = b"$PUBX,40,RMC,0,0,0,0,0,0*47\r\n"
PUBX_SET_GSA_OFF = b"$PUBX,40,GSA,0,0,0,0,0,0*4A\r\n"
PUBX_SET_GNS_OFF = b"$PUBX,40,GNS,0,0,0,0,0,0*41\r\n"
PUBX_SET_GLL_OFF = b"$PUBX,40,GLL,0,0,0,0,0,0*5C\r\n"

# Configure the NMEA protocol and enable GGA and VTG only, then raise the
# output and fix rates and turn on WAAS corrections.
DEFAULT_STARTUP_COMMANDS: tuple[bytes, ...] = (
    UBX_CFG_NMEA,
    PUBX_CONFIG_NMEA,
    PUBX_SET_GGA,
    PUBX_SET_VTG,
    PUBX_SET_RMC_OFF,
    PUBX_SET_GSA_OFF,
    PUBX_SET_GLL_OFF,
    PUBX_SET_GNS_OFF,
    PMTK_SET_NMEA_UPDATE_10HZ,
    PMTK_API_SET_FIX_CTL_5HZ,
    PMTK_ENABLE_WAAS,
)
