"""
Advertisement endpoints.
"""
import logging

from flask import Blueprint, jsonify

from .database import get_db
from .errors import NotFoundError
from .mappers import ad_to_json, to_db_timestamp
from .models import AdStatus, AdSubmission, json_body, parse_payload
from .security import sanitize_for_logging

ads_bp = Blueprint('ads', __name__, url_prefix='/api')

AD_NOT_FOUND = 'Ad not found'


@ads_bp.route('/ads', methods=['POST'])
def submit_ad():
    """Advertiser submission, pending until an admin activates it"""
    data = json_body()
    logging.debug(f"Ad submission received: {sanitize_for_logging(data)}")
    ad = parse_payload(AdSubmission, data)

    row = get_db().query_one("""
        INSERT INTO ads (client_name, email, plan, amount, receipt_image, ad_image, ad_content, ad_url,
                         ad_headline, ad_content_file, date_submitted)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, COALESCE(?, CURRENT_TIMESTAMP))
        RETURNING *
    """, (ad.client_name, ad.email, ad.plan, ad.amount, ad.receipt_image, ad.ad_image, ad.ad_content,
          ad.ad_url, ad.ad_headline, ad.ad_content_file, to_db_timestamp(ad.date_submitted)))

    logging.info(f"✅ Ad submitted with ID: {row['id']} (plan={row['plan']})")
    return jsonify(ad_to_json(row)), 201


@ads_bp.route('/ads/active', methods=['GET'])
def list_active_ads():
    """Ads currently shown on the public site"""
    rows = get_db().query(
        "SELECT * FROM ads WHERE status = 'active' ORDER BY date_submitted DESC, id DESC"
    )
    return jsonify([ad_to_json(row) for row in rows])


@ads_bp.route('/ads/<id:ad_id>', methods=['DELETE'])
def delete_ad(ad_id):
    row = get_db().query_one("DELETE FROM ads WHERE id = ? RETURNING id", (ad_id,))
    if row is None:
        raise NotFoundError(AD_NOT_FOUND)

    logging.info(f"🗑️ Ad deleted: ID={ad_id}")
    return jsonify({'success': True, 'message': 'Ad deleted successfully'})


# --- Admin moderation ---

@ads_bp.route('/admin/ads', methods=['GET'])
def list_all_ads():
    """Every ad regardless of status, newest submission first"""
    rows = get_db().query("SELECT * FROM ads ORDER BY date_submitted DESC, id DESC")
    return jsonify([ad_to_json(row) for row in rows])


def _set_status(ad_id, status: AdStatus):
    row = get_db().query_one("UPDATE ads SET status = ? WHERE id = ? RETURNING *", (status.value, ad_id))
    if row is None:
        raise NotFoundError(AD_NOT_FOUND)
    logging.info(f"📣 Ad {ad_id} is now {status.value}")
    return jsonify(ad_to_json(row))


@ads_bp.route('/admin/ads/<id:ad_id>/approve', methods=['PATCH'])
def approve_ad(ad_id):
    return _set_status(ad_id, AdStatus.ACTIVE)


@ads_bp.route('/admin/ads/<id:ad_id>/reject', methods=['PATCH'])
def reject_ad(ad_id):
    return _set_status(ad_id, AdStatus.REJECTED)
